"""Two components that need each other; bootstrap must fail."""
