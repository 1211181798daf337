import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
DEBUG = os.getenv('DEBUG', '0') == '1'
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'rxsafety',
]

# 引擎不做持久化，不配置 DATABASES

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
USE_TZ = True
TIME_ZONE = 'UTC'

# REST Framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'EXCEPTION_HANDLER': 'rxsafety.exception_handler.unified_exception_handler',
}

# rxsafety 引擎配置（默认值见 rxsafety/conf.py）
# 重复患者综合评分：姓名相似度权重 + 精确匹配加分，合计必须为 100
RXSAFETY_DUPLICATE_WEIGHTS = {
    'name': int(os.getenv('RXSAFETY_WEIGHT_NAME', '60')),
    'fiscal_code': int(os.getenv('RXSAFETY_WEIGHT_FISCAL_CODE', '20')),
    'date_of_birth': int(os.getenv('RXSAFETY_WEIGHT_DATE_OF_BIRTH', '12')),
    'phone': int(os.getenv('RXSAFETY_WEIGHT_PHONE', '8')),
}
RXSAFETY_DUPLICATE_MIN_SCORE = int(os.getenv('RXSAFETY_DUPLICATE_MIN_SCORE', '60'))
# 距 end_date 多少天内算"需续药"
RXSAFETY_REFILL_DUE_WINDOW_DAYS = int(os.getenv('RXSAFETY_REFILL_DUE_WINDOW_DAYS', '7'))

# Logging
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'rxsafety': {
            'handlers': ['console'],
            'level': os.getenv('RXSAFETY_LOG_LEVEL', 'INFO'),
        },
    },
}
