"""notedex - normalize frontmatter notes and publish them to a Meilisearch index."""

__version__ = "0.1.0"
