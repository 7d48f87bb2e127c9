CONNECTION_CLOSED_TIPS = (
    "\n\nTips to fix this issue:\n"
    "- Make sure the server script exists and is accessible\n"
    "- For Windows paths, make sure to use forward slashes (/)\n"
    "- Make sure you have the right permissions to execute the file\n"
    "- Check that you have the required environment variables (GEMINI_API_KEY) "
    "set in your .env file\n"
    "- Try using the full command format: node path/to/file.js"
)
MODULE_NOT_FOUND_TIP = (
    "\n\nThe server script file was not found. Please verify the path is correct."
)
FILE_NOT_FOUND_TIP = "\n\nFile or directory not found. Check that the path exists."


def connection_hint(error_message: str) -> str:
    """Return a user-facing failure text with tips for well-known errors."""
    message = f"Failed to connect: {error_message}"

    if "Connection closed" in error_message:
        message += CONNECTION_CLOSED_TIPS
    elif "Cannot find module" in error_message or "No module named" in error_message:
        message += MODULE_NOT_FOUND_TIP
    elif "ENOENT" in error_message or "No such file or directory" in error_message:
        message += FILE_NOT_FOUND_TIP

    return message
