"""
The MODEL layer contains pure data structures and geometry logic.
It has NO knowledge of the GUI (Qt). It deals with units, the viewport,
transform pipelines, figures and per-frame composition.
"""
