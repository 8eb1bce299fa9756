"""fmsplan - flight management flight plan core.

Segment/leg model of an FMS flight plan with procedure-driven segment
building and discontinuity management.
"""

__version__ = "0.1.0"
