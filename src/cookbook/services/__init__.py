"""Services: data store, recipe synchronization, gateways and view logic."""
