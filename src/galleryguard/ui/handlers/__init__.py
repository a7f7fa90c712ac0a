"""Non-rendering gallery logic used by the pages."""
