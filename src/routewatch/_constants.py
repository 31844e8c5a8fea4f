"""Internal constants shared across the package."""

GEOCODING_URL = "http://api.digitransit.fi/geocoding/v1/autocomplete"
ROUTING_URL = "https://api.digitransit.fi/routing/v1/routers/hsl/index/graphql"
USER_AGENT = "routewatch/0.1"
SUBSCRIPTION_KEY_HEADER = "digitransit-subscription-key"

# Timings are in seconds.
DEFAULT_SEARCH_COOLDOWN = 1.0
DEFAULT_POLL_INTERVAL = 60.0
DEFAULT_FRAME_TIMEOUT = 0.016
DEFAULT_REQUEST_TIMEOUT = 15.0

# Legs this short (seconds) are left out of the itinerary breakdown.
DEFAULT_MIN_LEG_DURATION = 60.0
DEFAULT_NUM_ITINERARIES = 5

DEFAULT_API_KEY_FILE = ".apikey"
DEFAULT_LOG_FILE = "client.log"
