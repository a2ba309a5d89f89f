"""
Application constants for DevConnector.

Contains social network names, GitHub endpoints and validation limits.
"""

# =============================================================================
# GitHub
# =============================================================================

GITHUB_API_BASE = "https://api.github.com"
GITHUB_GRAPHQL_ENDPOINT = "https://api.github.com/graphql"
GITHUB_USER_AGENT = "DevConnector/1.0"

# =============================================================================
# Profiles
# =============================================================================

# Social platforms a profile may link to
SOCIAL_NETWORKS = (
    "youtube",
    "twitter",
    "facebook",
    "linkedin",
    "instagram",
    "wechat",
    "weibo",
)

# Optional free-text profile fields, applied only when supplied
PROFILE_TEXT_FIELDS = (
    "company",
    "website",
    "location",
    "bio",
    "github_username",
)

# =============================================================================
# Validation
# =============================================================================

MIN_PASSWORD_LENGTH = 6

# =============================================================================
# Messages
# =============================================================================

MSG_NO_TOKEN = "No token, authorization denied"
MSG_INVALID_TOKEN = "Token is not valid"
MSG_USER_EXISTS = "User already exists"
MSG_INVALID_CREDENTIALS = "Invalid username or password"
MSG_TOKEN_USER_MISSING = "Invalid token. User does not exist."
MSG_NO_PROFILE = "There is no profile for this user"
MSG_PROFILE_NOT_FOUND = "Profile not found"
MSG_POST_NOT_FOUND = "Post not found"
MSG_COMMENT_NOT_FOUND = "Comment does not exist"
MSG_NOT_AUTHORIZED = "User not authorized"
MSG_ALREADY_LIKED = "Post already liked"
MSG_NOT_LIKED = "Post has not yet been liked"
MSG_INVALID_GITHUB_USER = "Invalid username"
MSG_SERVER_ERROR = "Server error"
MSG_CONCURRENT_UPDATE = "Resource was modified concurrently, please retry"

# Choices offered by the profile form
PROFESSIONAL_STATUSES = (
    "Developer",
    "Junior Developer",
    "Senior Developer",
    "Manager",
    "Student or Learning",
    "Instructor",
    "Intern",
    "Other",
)
