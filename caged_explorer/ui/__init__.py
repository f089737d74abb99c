"""Terminal renderings of the fretboard."""
