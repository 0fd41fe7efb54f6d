"""Model validators for the sample API, discovered by module scan at startup."""
