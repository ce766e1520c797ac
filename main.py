#!/usr/bin/env python3
import sys
import uvicorn
from config.logging_config import configure
from config.app_config import settings, BrewhouseConfig
from brewhouse.api import create_app

def main():
    configure()
    app = create_app(BrewhouseConfig.from_settings())
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("🌙  graceful shutdown")
