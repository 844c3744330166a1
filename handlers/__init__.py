"""
handlers/ - Presentation Layer
================================
Flask blueprints. Each handler parses the HTTP request, delegates to the
appropriate repository or service, and serializes the response as JSON.
No business logic lives here.
"""
