"""Kumiko - Turn lattice sketches into CNC-ready strips.

Kumiko takes a lattice pattern drawn as line segments on a grid and derives the
physical wooden strips it is made of: their lengths, the half-depth notches
where strips cross, and a depth-annotated SVG that a CNC router can cut.

Example:
    $ kumiko export design.json layout.json -o board.svg

This will write board.svg with every placed strip outlined at full depth and
every notch cut at half depth.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
