"""Static reference tables bundled with the package."""
