"""
The MODEL layer contains pure data structures and transform math.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the body catalog, the scene graph and shared state.
"""
