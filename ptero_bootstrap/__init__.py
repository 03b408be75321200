"""ptero-bootstrap: host preflight and prerequisite installer for the panel/agent stack."""

__version__ = "0.1.0"
