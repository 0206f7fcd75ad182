CANNOT_SHARE_ADDRESS = "{FROM} and {TO} cannot share addresses"

DEFAULTS_NOT_FOUND = "No dynamic mail defaults registered for prefix '{prefix}'"

MISSING_HOST = "SMTP host is not configured"

INVALID_PORT = "SMTP port must be an integer, got {port!r}"

UNSUPPORTED_ENCRYPTION = "Unsupported encryption mode '{secure}', expected one of: {allowed}"

SENDER_NOT_CONFIGURED = "No 'from' address configured; cannot send mail"

UNKNOWN_RESOURCE = "No dynamic mail resource bound to '{name}'"

INVALID_GLOBAL_ADDRESS = "Global '{address_type}' address {address!r} is not a valid email address"
