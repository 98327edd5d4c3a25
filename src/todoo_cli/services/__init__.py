"""Services module for Todoo CLI - Business logic layer."""
