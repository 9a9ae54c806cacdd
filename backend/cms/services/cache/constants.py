"""Cache TTL and key prefix constants."""

# Cache TTL constants (in seconds)
TTL_PROJECTS_LIST = 30  # public listing, matches the CDN s-maxage
TTL_DASHBOARD_SUMMARY = 30  # dashboard counters

# Cache key prefixes - using Redis naming conventions
KEY_PREFIX_PROJECTS = "projects"  # projects:list
KEY_PREFIX_DASHBOARD = "dashboard"  # dashboard:summary
