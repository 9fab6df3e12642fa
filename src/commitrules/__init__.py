"""commitrules — validate commit messages against a declarative rule set."""

__version__ = "0.1.0"
