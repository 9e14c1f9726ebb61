"""Feature modules: accounts, transfers and the shared error taxonomy."""
