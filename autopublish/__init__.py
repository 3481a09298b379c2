"""
Autopublish - CI helper that validates a spec and publishes it to /TR/.

This package provides tools for:
- Installing the spec validator into the working directory
- Validating a specification document with the installed validator
- Submitting the document to the Echidna publication service
- Orchestrating the three steps as a fail-fast pipeline
"""

__version__ = "0.1.0"
