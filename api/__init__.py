"""HTTP control API for local matches."""
