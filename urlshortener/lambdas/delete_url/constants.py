# Error codes & log events
MISSING_SHORT_ID = 'MISSING_SHORT_ID'
INVALID_SHORT_ID = 'INVALID_SHORT_ID'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DELETE_SUCCESS = 'DELETE_SUCCESS'
