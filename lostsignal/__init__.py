"""A colour-matching arcade dodger: simulation, maths helpers and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]