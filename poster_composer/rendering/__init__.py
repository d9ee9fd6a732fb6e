"""Raster pipeline: positions, canvas, compositing, text and orchestration."""
