"""Infrastructure layer — record files and the workspace context object."""
