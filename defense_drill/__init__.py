"""Defense Drill - weighted drill suggestions and simulated attack alarms."""

__version__ = "0.1.0"
