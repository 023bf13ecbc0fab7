"""Host-side glue around the core: error reporting, sessions and the interactive shell."""
