"""
Centralized constants for Interline Translate.
"""

# ===========================================
# LANGUAGES
# ===========================================
DEFAULT_SOURCE_LANGUAGE = 'en'
DEFAULT_TARGET_LANGUAGE = 'zh-CN'

# ===========================================
# PHRASES
# ===========================================
DEFAULT_MIN_WORD_LENGTH = 4
BATCH_DELIMITER = '\n'                # phrases are joined/split on this
ANNOTATION_OPEN = '[['
ANNOTATION_CLOSE = ']]'

# ===========================================
# CACHE
# ===========================================
CACHE_FILE_NAME = 'translation_cache.json'
CACHE_PAIR_SEPARATOR = ':'            # "en:zh-CN"

# ===========================================
# PROVIDERS
# ===========================================
DEFAULT_PROVIDER = 'google'
GOOGLE_TRANSLATE_HOST = 'translate.googleapis.com'
GOOGLE_TRANSLATE_PATH = '/translate_a/single'
OPENAI_CHAT_URL = 'https://api.openai.com/v1/chat/completions'
OPENAI_DEFAULT_MODEL = 'gpt-4o-mini'
REQUEST_TIMEOUT_SECONDS = 30.0

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/interline.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
