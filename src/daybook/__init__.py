"""daybook - a date-addressed markdown journal."""
