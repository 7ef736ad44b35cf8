import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(APP_DIR, 'data')
CONFIG_DIR = os.environ.get('NEXIPLAY_CONFIG_DIR') or os.path.join(APP_DIR, 'config')
DB_FILE = os.path.join(CONFIG_DIR, 'nexiplay.db')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')
UPLOADS_DIR = os.path.join(DATA_DIR, 'uploads')

NEXIPLAY_DB = os.environ.get('NEXIPLAY_DB') or 'sqlite:///' + DB_FILE

BUILD_VERSION = '20261019_0930'

DEFAULT_SETTINGS = {
    "storage": {
        "backend": "local",
        "supabase_url": "",
        "service_key": "",
        "local_root": UPLOADS_DIR,
        "public_base_url": "http://localhost:8466",
        "poster_bucket": "posters",
        "timeout": 30,
    },
    "admin": {
        "api_token": "",
    },
    "uploads": {
        "max_workers": 4,
    },
}

# Catalog
CONTENT_TYPE_MOVIE = 'movie'
CONTENT_TYPE_SERIES = 'series'
CONTENT_TYPE_ANIME = 'anime'
CONTENT_TYPES = [
    CONTENT_TYPE_MOVIE,
    CONTENT_TYPE_SERIES,
    CONTENT_TYPE_ANIME,
]
EPISODIC_TYPES = [CONTENT_TYPE_SERIES, CONTENT_TYPE_ANIME]

DEFAULT_LANGUAGE = 'Hindi'
DEFAULT_SOURCE = 'BluRay'
DEFAULT_FORMAT = 'MKV'
DEFAULT_SUBTITLE = 'English'

# Dead link report kinds
LINK_KIND_MOVIES = 'movies'
LINK_KIND_EPISODES = 'episodes'
LINK_KINDS = [LINK_KIND_MOVIES, LINK_KIND_EPISODES]

# Ads
AD_PLACEMENTS = [
    'home_top',
    'home_bottom',
    'movie_sidebar',
    'download_bottom',
    'popup_global',
    'inline',
]
AD_TYPE_IMAGE = 'image'
AD_TYPE_SCRIPT = 'script'
AD_TYPES = [AD_TYPE_IMAGE, AD_TYPE_SCRIPT]

# Notices
NOTICE_TYPES = ['top_bar', 'popup']
NOTICE_PAGES = ['all', 'home', 'movie', 'episode_list']

# Inbox statuses
DMCA_STATUSES = ['pending', 'approved', 'rejected']
CONTENT_REQUEST_STATUSES = ['pending', 'added', 'rejected']

TELEGRAM_TYPES = ['channel', 'group']

ALLOWED_IMAGE_EXTENSIONS = [
    'jpg',
    'jpeg',
    'png',
    'webp',
    'gif',
    'avif',
]
