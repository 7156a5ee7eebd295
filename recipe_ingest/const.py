"""Constants for the recipe ingestion pipeline."""

# HTTP fetching
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_RETRIES = 3
DEFAULT_MAX_RESPONSE_SIZE = 5 * 1024 * 1024  # 5 MB
DEFAULT_MAX_REDIRECTS = 5
SCRAPERAPI_ENDPOINT = "https://api.scraperapi.com/"
ALLOWED_CONTENT_TYPES = ("text/html", "application/xhtml", "application/xml")

# Text bounding for downstream model calls
DEFAULT_TRUNCATION_MARKER = "[CONTENT TRUNCATED]"
DEFAULT_MAX_INGREDIENT_LINES = 100
DEFAULT_MAX_INSTRUCTION_LINES = 200

# Ingredient groups
DEFAULT_GROUP_NAME = "Main"

# Vague quantities normalize to this placeholder amount
VAGUE_AMOUNT_PLACEHOLDER = "1"

# Display-name markers
REMOVED_MARKER = "(removed)"
SUBSTITUTED_MARKER = "substituted for"

# Query parameters dropped during URL canonicalization
TRACKING_PARAMS = frozenset({
    # UTM
    "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
    # Facebook
    "fbclid", "fb_action_ids", "fb_action_types", "fb_ref", "fb_source",
    # Google
    "gclid", "gclsrc", "dclid", "gbraid", "wbraid",
    # General
    "ref", "referrer", "source", "campaign", "medium",
    # Social
    "igshid", "twclid", "li_fat_id",
    # Analytics
    "_ga", "_gl", "_ke", "mc_cid", "mc_eid",
    # Affiliate
    "aff_id", "affiliate_id", "aff", "tag",
    # Email
    "email_id", "email_campaign", "email_source",
    # Matomo / HubSpot
    "pk_campaign", "pk_kwd", "pk_medium", "pk_source",
    "hsCtaTracking", "hsa_acc", "hsa_cam", "hsa_grp", "hsa_ad", "hsa_src",
    "hsa_tgt", "hsa_kw", "hsa_mt", "hsa_net", "hsa_ver",
})

# Hosts classified as video sources by input detection
VIDEO_HOSTS = ("youtube.com", "youtu.be", "instagram.com", "tiktok.com")
