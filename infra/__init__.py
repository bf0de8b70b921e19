"""Cross-cutting helpers: paths, logging and runtime settings."""
