"""
User-visible strings.

Single locale; keys match the ones the web UI bundles use so a translated
catalogue can be dropped in later.
"""

MESSAGES = {
    "error": "Error",
    "serverErrorColon": "Server Error:",
    "runInBackground": "Run In Background",
    "backgroundExecutionStarted": "The background execution has started.",
    "GenericFileRepository.REPOSITORY_FOLDER_DISPLAY": "Repository",
}


def get_string(key: str) -> str:
    """Look up a message, falling back to the key itself."""
    return MESSAGES.get(key, key)
