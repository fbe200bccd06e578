"""Fixed values shared by the webhook handler and its GitHub calls."""

# Header carrying the HMAC-SHA256 signature of the raw body
SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="

# Header carrying the event name
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"

# Only newly added project items get a checklist
CREATED_ACTION = "created"

# REST media type used for issue reads and writes
GITHUB_REST_ACCEPT = "application/vnd.github.v3+json"

# Separator placed between the existing issue body and the checklist
CHECKLIST_SEPARATOR = "\n\n"

ISSUE_NODE_QUERY = """
query($id: ID!) {
    node(id: $id) {
        ... on Issue {
            url
            body
        }
    }
}
"""

# Response texts
ROOT_TEXT = "GitHub Webhook Receiver"
SIGNATURE_MISMATCH_TEXT = "Signature mismatch!"
PROJECT_MISMATCH_TEXT = "No action taken."
ACTION_NOT_CREATED_TEXT = "No action taken for non-created action."
MISSING_CONTENT_TEXT = "content_node_id not found in the webhook payload."
ACCEPTED_TEXT = "Webhook received."
