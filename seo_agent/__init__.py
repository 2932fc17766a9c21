"""Single-page SEO analysis with knowledge retrieval and a grounded chat assistant."""

__version__ = "0.1.0"
