"""featuregen: Gherkin feature files from OpenAPI documents."""

__version__ = "0.1.0"
