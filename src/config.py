import os
from dotenv import load_dotenv

# .env 파일에서 환경 변수 로드
load_dotenv()

# "openweather" | "darksky"
WEATHER_PROVIDER = os.getenv("WEATHER_PROVIDER", "openweather")
WEATHER_API_KEY = os.getenv("WEATHER_API_KEY", "")

# 위치: 위경도 > 주소 > IP 순으로 사용
WIDGET_ADDRESS = os.getenv("WIDGET_ADDRESS")
WIDGET_LATITUDE = os.getenv("WIDGET_LATITUDE")
WIDGET_LONGITUDE = os.getenv("WIDGET_LONGITUDE")

WIDGET_LANGUAGE = os.getenv("WIDGET_LANGUAGE", "en")
WIDGET_UNITS = os.getenv("WIDGET_UNITS", "us")

# 자동 갱신 주기 (밀리초). 비어 있으면 자동 갱신 안 함
WIDGET_UPDATE_INTERVAL = os.getenv("WIDGET_UPDATE_INTERVAL")

# 화면 표시용 옵션 (코어 로직에는 영향 없음)
WIDGET_HIDE_HEADER = os.getenv("WIDGET_HIDE_HEADER", "false").lower() in ("1", "true", "yes")
WIDGET_DISABLE_ANIMATION = os.getenv("WIDGET_DISABLE_ANIMATION", "false").lower() in ("1", "true", "yes")
WIDGET_BAR_COLOR = os.getenv("WIDGET_BAR_COLOR", "#444")
WIDGET_TEXT_COLOR = os.getenv("WIDGET_TEXT_COLOR", "#333")
