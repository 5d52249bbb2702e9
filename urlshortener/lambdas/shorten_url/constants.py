# Error codes & log events
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
SHORT_ID_GENERATION_FAILED = 'SHORT_ID_GENERATION_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
