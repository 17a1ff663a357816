"""User-facing message catalog.

Every error and success text returned by the API is looked up here by
``MessageKey``. The bundle is built once at startup and may be overridden
per deployment through ``Settings.messages``.
"""

from enum import Enum
from typing import Mapping

import logfire


class MessageKey(str, Enum):
    """Keys for every user-facing message."""

    # Auth
    UNAUTHORIZED_ACTION = "unauthorized_action"
    FORBIDDEN_ACTION = "forbidden_action"

    # Users
    USER_NOT_FOUND = "user_not_found"
    USER_BANNED = "user_banned"
    USER_ALREADY_BANNED = "user_already_banned"
    USER_ALREADY_UNBANNED = "user_already_unbanned"
    USER_ALREADY_ADMIN = "user_already_admin"
    USER_EMAIL_CONFLICT = "user_email_conflict"
    USER_HANDLE_CONFLICT = "user_handle_conflict"
    USER_HANDLE_CHANGE = "user_handle_change"
    USER_SELF_MODERATION = "user_self_moderation"

    # Nests
    NEST_NOT_FOUND = "nest_not_found"
    NEST_TITLE_CONFLICT = "nest_title_conflict"

    # Posts
    POST_NOT_FOUND = "post_not_found"

    # Comments
    COMMENT_NOT_FOUND = "comment_not_found"
    COMMENT_EMPTY = "comment_empty"

    # Votes
    VOTE_ALREADY_EXISTS = "vote_already_exists"
    VOTE_NOT_CAST = "vote_not_cast"
    VOTE_CONFLICT = "vote_conflict"

    # Media
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    FILE_TOO_LARGE = "file_too_large"

    # Search
    SEARCH_NO_QUERY = "search_no_query"
    QUERY_TOO_SMALL = "query_too_small"

    # General
    INVALID_REQUEST = "invalid_request"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    RESOURCE_CONFLICT = "resource_conflict"

    # Success
    OPERATION_COMPLETED = "operation_completed"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    USER_SIGNED_OUT = "user_signed_out"
    USER_BAN_APPLIED = "user_ban_applied"
    USER_BAN_LIFTED = "user_ban_lifted"
    USER_PROMOTED = "user_promoted"
    NEST_CREATED = "nest_created"
    NEST_UPDATED = "nest_updated"
    POST_CREATED = "post_created"
    POST_UPDATED = "post_updated"
    POST_DELETED = "post_deleted"
    COMMENT_CREATED = "comment_created"
    COMMENT_UPDATED = "comment_updated"
    COMMENT_DELETED = "comment_deleted"
    VOTE_ADDED = "vote_added"
    VOTE_UPDATED = "vote_updated"
    VOTE_REMOVED = "vote_removed"


DEFAULT_MESSAGES: dict[MessageKey, str] = {
    MessageKey.UNAUTHORIZED_ACTION: "You need to be logged in to perform this action.",
    MessageKey.FORBIDDEN_ACTION: "You do not have permission to perform this action.",
    MessageKey.USER_NOT_FOUND: "User not found.",
    MessageKey.USER_BANNED: "This user is banned.",
    MessageKey.USER_ALREADY_BANNED: "This user is already banned.",
    MessageKey.USER_ALREADY_UNBANNED: "This user is not banned.",
    MessageKey.USER_ALREADY_ADMIN: "This user is already an admin.",
    MessageKey.USER_EMAIL_CONFLICT: "This email is already in use.",
    MessageKey.USER_HANDLE_CONFLICT: "This handle is already taken.",
    MessageKey.USER_HANDLE_CHANGE: "Cannot change username.",
    MessageKey.USER_SELF_MODERATION: "You cannot perform this action on your own account.",
    MessageKey.NEST_NOT_FOUND: "Nest not found.",
    MessageKey.NEST_TITLE_CONFLICT: "A nest with this title already exists.",
    MessageKey.POST_NOT_FOUND: "Post with given id not found.",
    MessageKey.COMMENT_NOT_FOUND: "Comment not found.",
    MessageKey.COMMENT_EMPTY: "Comment cannot be empty.",
    MessageKey.VOTE_ALREADY_EXISTS: "You have already voted on this post.",
    MessageKey.VOTE_NOT_CAST: "Your vote was not cast.",
    MessageKey.VOTE_CONFLICT: "Your vote changed while this request was processed. Please retry.",
    MessageKey.UNSUPPORTED_FILE_TYPE: "The uploaded file type is not supported.",
    MessageKey.FILE_TOO_LARGE: "The uploaded file is too large.",
    MessageKey.SEARCH_NO_QUERY: "No string provided to search.",
    MessageKey.QUERY_TOO_SMALL: "Search string must be at least 3 characters long.",
    MessageKey.INVALID_REQUEST: "Invalid request data.",
    MessageKey.INTERNAL_SERVER_ERROR: "An unexpected error occurred. Please try again later.",
    MessageKey.RESOURCE_CONFLICT: "The request conflicts with existing resource.",
    MessageKey.OPERATION_COMPLETED: "Operation completed successfully.",
    MessageKey.USER_CREATED: "User created successfully.",
    MessageKey.USER_UPDATED: "User updated successfully.",
    MessageKey.USER_SIGNED_OUT: "Logged out successfully.",
    MessageKey.USER_BAN_APPLIED: "User has been banned successfully.",
    MessageKey.USER_BAN_LIFTED: "User has been unbanned successfully.",
    MessageKey.USER_PROMOTED: "User has been promoted.",
    MessageKey.NEST_CREATED: "Nest created successfully.",
    MessageKey.NEST_UPDATED: "Nest updated successfully.",
    MessageKey.POST_CREATED: "Post created successfully.",
    MessageKey.POST_UPDATED: "Post updated successfully.",
    MessageKey.POST_DELETED: "Post deleted successfully.",
    MessageKey.COMMENT_CREATED: "Comment created successfully.",
    MessageKey.COMMENT_UPDATED: "Comment updated successfully.",
    MessageKey.COMMENT_DELETED: "Comment deleted successfully.",
    MessageKey.VOTE_ADDED: "Vote added successfully.",
    MessageKey.VOTE_UPDATED: "Vote updated successfully.",
    MessageKey.VOTE_REMOVED: "Vote removed successfully.",
}


class MessageBundle:
    """Immutable lookup of message texts by key."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        """Build the bundle from defaults and deployment overrides.

        Args:
            overrides: Texts keyed by ``MessageKey`` value

        Raises:
            ValueError: If an override names an unknown key
        """
        texts = dict(DEFAULT_MESSAGES)
        for raw_key, text in (overrides or {}).items():
            try:
                key = MessageKey(raw_key)
            except ValueError:
                raise ValueError(f"Unknown message key in overrides: {raw_key}")
            texts[key] = text

        missing = set(MessageKey) - texts.keys()
        if missing:
            raise ValueError(f"Missing message texts: {sorted(k.value for k in missing)}")

        self._texts = texts
        logfire.debug("Message bundle loaded", overrides=len(overrides or {}))

    def text(self, key: MessageKey) -> str:
        """Get the text for a message key."""
        return self._texts[key]

    def __getitem__(self, key: MessageKey) -> str:
        return self._texts[key]
