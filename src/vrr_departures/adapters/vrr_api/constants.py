"""Constants for the VRR departure feed."""

VRRF_BASE_URL = "https://vrrf.finalrewind.org"

# Query parameters selecting the JSON frontend
VRRF_FRONTEND = "json"

# Array-valued field holding the departure records
VRRF_RECORDS_FIELD = "raw"
