"""Faces and meshes."""
