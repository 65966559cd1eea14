"""
skyglow: how dark is the sky at (lat, lng)?

Samples the World Atlas 2015 artificial sky brightness raster and reports
SQM (mag/arcsec²) plus a fractional Bortle class over a small HTTP API.
"""

__version__ = "0.1.0"
