"""Common constants."""

# Images per listing
MIN_IMAGES_PER_LISTING = 1
MAX_IMAGES_PER_LISTING = 6

# Listing form bounds (client side)
LISTING_NAME_MIN_LENGTH = 10
LISTING_NAME_MAX_LENGTH = 62
MIN_ROOMS = 1
MAX_ROOMS = 10
MIN_REGULAR_PRICE = 50

# Image uploads
ALLOWED_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "webp", "avif", "bmp", "svg"]

# Suffix length appended to usernames derived from a Google profile name
OAUTH_USERNAME_SUFFIX_LENGTH = 4
