"""
Конфигурация приложения
"""
import os
from typing import List, Optional, Dict
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Базовые настройки приложения
APP_NAME = "Saju Fortune API Service"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Асинхронный API сервис для генерации сажу-прогнозов и карт манседёк"

# Настройки сервера
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8081"))
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
WORKERS = int(os.getenv("WORKERS", "4"))

# Настройки CORS
CORS_ORIGINS: List[str] = [
    "http://localhost",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8080",
]

# Добавление дополнительных CORS origins из переменной окружения
if os.getenv("ADDITIONAL_CORS_ORIGINS"):
    CORS_ORIGINS.extend(os.getenv("ADDITIONAL_CORS_ORIGINS").split(","))

# Настройки логирования
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Создаем директорию для логов, если она не существует
LOG_DIR.mkdir(exist_ok=True)

# Настройки Redis (отложенные сохранения после входа)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_CONNECT_ATTEMPTS = int(os.getenv("REDIS_CONNECT_ATTEMPTS", "3"))
PENDING_SAVE_TTL_SECONDS = int(os.getenv("PENDING_SAVE_TTL_SECONDS", "3600"))

# Настройки Supabase (хранилище результатов)
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_RESULTS_TABLE = os.getenv("SUPABASE_RESULTS_TABLE", "saju_results")
SUPABASE_TIMEOUT = int(os.getenv("SUPABASE_TIMEOUT", "10"))

# Эндпоинт генерации прогноза (вызывается клиентским адаптером)
FORTUNE_ENDPOINT_URL = os.getenv(
    "FORTUNE_ENDPOINT_URL",
    f"{SUPABASE_URL}/functions/v1/generate-saju" if SUPABASE_URL else f"http://{HOST}:{PORT}/functions/v1/generate-saju"
)
FORTUNE_ENDPOINT_KEY = os.getenv("FORTUNE_ENDPOINT_KEY", SUPABASE_ANON_KEY)
# Пустое значение - таймаут транспорта по умолчанию
FORTUNE_CLIENT_TIMEOUT: Optional[float] = (
    float(os.getenv("FORTUNE_CLIENT_TIMEOUT")) if os.getenv("FORTUNE_CLIENT_TIMEOUT") else None
)

# Ключ, которым защищен собственный эндпоинт генерации (пустой - без проверки)
GENERATION_API_KEY = os.getenv("GENERATION_API_KEY", "")

# Настройки OpenAI Assistants API
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_ASSISTANT_ID = os.getenv("OPENAI_ASSISTANT_ID", "")
ASSISTANT_POLL_INTERVAL = float(os.getenv("ASSISTANT_POLL_INTERVAL", "1"))
ASSISTANT_POLL_MAX_ATTEMPTS = int(os.getenv("ASSISTANT_POLL_MAX_ATTEMPTS", "30"))
ASSISTANT_REQUEST_TIMEOUT = int(os.getenv("ASSISTANT_REQUEST_TIMEOUT", "30"))

# Настройки API карты манседёк
CHART_API_URL = os.getenv("CHART_API_URL", "https://api.forceteller.com/api/pro/profile/saju/chart")
CHART_API_HEADERS: Dict[str, str] = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "cache-control": "no-cache",
    "content-type": "application/json",
    "origin": "https://pro.forceteller.com",
    "pragma": "no-cache",
    "referer": "https://pro.forceteller.com/",
    "user-agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36",
}
CHART_LOCATION_ID = int(os.getenv("CHART_LOCATION_ID", "1835847"))  # Сеул
CHART_LOCATION_NAME = os.getenv("CHART_LOCATION_NAME", " 서울특별시, 대한민국")

# Публичный адрес фронтенда для ссылок "поделиться"
SHARE_BASE_URL = os.getenv("SHARE_BASE_URL", "http://localhost:5173")

# Функция для получения полного URL API
def get_api_url(path: str = "") -> str:
    """Получение полного URL API с учетом настроек"""
    base_url = f"http://{HOST}:{PORT}"
    if path:
        return f"{base_url}/{path.lstrip('/')}"
    return base_url
