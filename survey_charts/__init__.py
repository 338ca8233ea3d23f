"""Survey answer tallying and charting.

read -> normalize -> validate -> aggregate -> project, plus a matplotlib
renderer and a batch CLI (``survey-charts``).
"""

__version__ = "0.1.0"
