"""HTTP driver for the pixel pipeline."""
