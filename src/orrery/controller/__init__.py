"""
The CONTROLLER layer advances the scene and reacts to input.
Like the model, it is free of Qt and PyVista; the view drives it.
"""
