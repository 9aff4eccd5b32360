"""Track time spent on Markdown notes and log it in their front matter."""

__version__ = "0.1.0"
