"""Figures producing model-space line batches (2D ``Line`` or ``Line3D``)."""
