"""tapship: package standalone binaries and publish a Homebrew formula."""

__version__ = "0.1.0"
