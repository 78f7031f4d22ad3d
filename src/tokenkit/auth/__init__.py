"""Token signing, parsing and the error taxonomy."""
