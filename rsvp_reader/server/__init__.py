"""HTTP API serving prepared reading sessions and the WPM preference.

WHY: A browser front end (or any other client) can do the display and
timing itself but should not re-implement tokenizing and ORP selection.
The API hands out exactly what the desktop and terminal readers use.
"""
