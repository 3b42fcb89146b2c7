"""Plugin system — pluggy hook specifications, discovery, and dispatch."""
