"""Services: search session, chat and message actions, DI container."""
