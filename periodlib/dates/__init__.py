"""Calendar helpers and the literal date collaborators."""
