"""logstage - Stage rotated log files through a compressing temp directory."""

__version__ = "0.1.0"
