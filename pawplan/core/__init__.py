"""Infrastructure shared by the services: configuration, logging, errors, caching and the store protocol."""
