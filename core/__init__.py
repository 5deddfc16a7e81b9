"""Order storage service core: domain, data mapping, infrastructure and settings."""
