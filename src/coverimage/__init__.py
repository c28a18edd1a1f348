"""Cover image upload form for journal publications."""
