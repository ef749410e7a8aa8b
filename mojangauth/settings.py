import os

from .models import Agent

# Endpoints
AUTH_ENDPOINT = "https://authserver.ely.by"

REQUEST_TIMEOUT = 2.5  # seconds
SESSION_EXPIRY_HOURS = 2

MINECRAFT_AGENT: Agent = {"name": "Minecraft", "version": 1}

AUTH_DEBUG = os.getenv("AUTH_DEBUG", "0") not in {"", "0"}
