"""Configuration settings for the order dashboard"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Order API Configuration
ORDERS_URL = os.getenv('WC_ORDERS_URL', '')
CONSUMER_KEY = os.getenv('WC_CONSUMER_KEY', '')
CONSUMER_SECRET = os.getenv('WC_CONSUMER_SECRET', '')
ORDERS_PER_PAGE = int(os.getenv('ORDERS_PER_PAGE') or '100')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT') or '30')
MAX_PAGES = int(os.getenv('MAX_PAGES') or '50')

# Saved order dump, read instead of the API when set
ORDERS_FILE = os.getenv('ORDERS_FILE', '')

# Fulfillment detection
PICKUP_KEYWORDS = ('retiro', 'pickup')

# Placeholder labels
NO_NAME = 'Sin nombre'
NO_PHONE = 'Sin teléfono'
NO_EMAIL = 'Sin email'
NO_RECIPIENT = 'Sin destinatario'
NO_DATE = 'Sin fecha'
NO_SLOT = 'Sin horario'
NO_DELIVERY_TYPE = 'No definido'

# Filter sentinel
STATUS_ALL = 'all'
