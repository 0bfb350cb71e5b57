#!/usr/bin/env python3
"""
Retail Bank Simulation Entry Point

Starts the FastAPI server for the bank simulation.
"""

import sys

from retail_bank.api import run_server
from retail_bank.bank import Bank
from retail_bank.config import get_config
from retail_bank.logging_config import setup_logging


if __name__ == "__main__":
    config = get_config()
    logger = setup_logging(level=config.log_level, log_format=config.log_format)

    bank = Bank.get_instance(config.bank_name, config.bank_location)
    print(f"🏦 Starting {bank.name} ({bank.location})...")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(host=config.api_host, port=config.api_port)
    except KeyboardInterrupt:
        print("\n👋 Shutting down...")
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)
