"""Core text pipeline and playback state.

WHY: The core package is the deterministic heart of the reader: the
tokenizer, the ORP calculator, the render model builder, and the
presentation driver. Every surface (GUI, terminal, HTTP) consumes it.

HOW: tokenizer.py splits text, orp.py picks the fixation character,
render_model.py splits each token around it, models.py holds the
playback data, driver.py runs the transport state machine.

RULES:
- Pure functions only in tokenizer, orp, and render_model
- models.py dataclasses are the contract with the UI layers
- driver.py is the only place that mutates the playback index
"""
