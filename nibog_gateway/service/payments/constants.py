"""Constants of the PhonePe pay page protocol."""

PAY_API_PATH = "/pg/v1/pay"
STATUS_API_PATH = "/pg/v1/status"

SIGNATURE_SEPARATOR = "###"

TRANSACTION_ID_PREFIX = "NIBOG_"
MAX_TRANSACTION_ID_LENGTH = 38
SHORT_BOOKING_ID_LENGTH = 6

REDIRECT_MODE = "REDIRECT"
PAY_PAGE_INSTRUMENT = "PAY_PAGE"

BOOKING_REF_PREFIX = "PPT"
BOOKING_REF_SUFFIX_LENGTH = 3
