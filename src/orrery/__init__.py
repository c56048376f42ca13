"""Interactive 3D solar system viewer."""
