"""Layout and interaction engine for company/contract graphs."""
