class CapturedImageFields:
    """MongoDB field names for the captured_images collection"""

    MONGO_ID = "_id"

    URL = "url"
    DETECTIONS = "detections"
    CONFIDENCE = "confidence"
    CREATED_AT = "created_at"
    IS_PROTECTED = "is_protected"
    USER_ID = "user_id"


class LocalCaptureFields:
    """Keys of a record in the local fallback store"""

    ID = "id"
    URL = "url"
    TIMESTAMP = "timestamp"
    DETECTIONS = "detections"
    CONFIDENCE = "confidence"
    IS_PROTECTED = "is_protected"
    SYNC_STATE = "sync_state"
