ERROR_EMAIL_ALREADY_REGISTERED = "Email already registered"
ERROR_INVALID_EMAIL_OR_PASSWORD = "Invalid email or password"
ERROR_INVALID_TOKEN = "Invalid token"
ERROR_INVALID_USER_ID = "Invalid user id"
ERROR_USER_INACTIVE = "User is inactive"
ERROR_RESET_TOKEN_INVALID = "Invalid or expired password reset link."
ERROR_RESET_TOKEN_EXPIRED = "Password reset link has expired."
ERROR_USER_NOT_FOUND = "User not found"
ERROR_INVALID_COUNTRY = "Country must be a two-letter code"
ERROR_INVALID_PREFERENCE = "Preference values must be between 1 and 64 characters"
ERROR_INVALID_FULL_NAME = "Full name must be at most 120 characters"
