"""IIT Calc - Individual income tax withholding calculator."""

__version__ = "0.3.0"
