import uuid


def generate_client_token() -> str:
    """Fresh random (version 4) UUID in its canonical text form."""
    return str(uuid.uuid4())
