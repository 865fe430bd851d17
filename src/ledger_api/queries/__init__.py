"""Read query builders."""
