"""Service layer. Runs forms on behalf of the CLI and returns ServiceResult."""
