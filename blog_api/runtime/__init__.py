"""Runtime configuration, application context and database bootstrap."""
