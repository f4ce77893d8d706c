"""Matrix client-server API endpoint descriptors."""
