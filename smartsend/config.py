import os
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from .env file with explicit path
load_dotenv(dotenv_path=Path(__file__).parent.parent / '.env')

# Delivery Configuration
#
# WhatsApp accepts far longer texts, but 3800 chars is the practical limit
# for a message that still displays well on a phone.
WA_MESSAGE_LIMIT = int(os.getenv("WA_MESSAGE_LIMIT", "3800"))
MESSAGE_DELAY_MS = int(os.getenv("MESSAGE_DELAY_MS", "500"))  # pause between parts
QUOTE_FIRST_ONLY = os.getenv("QUOTE_FIRST_ONLY", "true").lower() == "true"

# Label used by the banner-style part indicator ("━━━ Part 2/3 ━━━")
PART_LABEL = os.getenv("PART_LABEL", "Part")

# Bundled transports apply this timeout; the dispatcher itself never times out.
TRANSPORT_TIMEOUT_SECONDS = float(os.getenv("TRANSPORT_TIMEOUT_SECONDS", "30"))

# WATI Configuration
WATI_API_KEY = os.getenv("WATI_API_KEY")
WATI_API_URL = os.getenv("WATI_API_URL")

# ManyChat Configuration
#
# Strict separation of Facebook and Instagram API keys.
# MANYCHAT_API_URL defaults to official ManyChat API base if not provided.
MANYCHAT_API_URL = os.getenv('MANYCHAT_API_URL', 'https://api.manychat.com')
MANYCHAT_API_KEY = os.getenv('MANYCHAT_API_KEY')  # Facebook
MANYCHAT_INSTAGRAM_API_KEY = os.getenv('MANYCHAT_INSTAGRAM_API_KEY')  # Instagram
