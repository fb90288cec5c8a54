"""
The APP layer: PySide6 window, canvas widget and lab panels.
It turns Qt events into viewport input and form actions, and paints frames.
"""
