import os


class Settings:
    def __init__(self):
        self.app_name = "CareBill"
        self.api_version = "1.0.0"
        self.environment = os.getenv("CAREBILL_ENVIRONMENT", "development")
        self.secret_key = os.getenv("CAREBILL_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = 30
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("CAREBILL_DATABASE_URL", "sqlite:///./carebill.db")
        self.log_level = os.getenv("CAREBILL_LOG_LEVEL", "INFO")
        self.invoice_number_prefix = os.getenv("CAREBILL_INVOICE_PREFIX", "CGAR")
        # Invoices fall due on this day of the month after the invoice date
        self.payment_due_day = 15


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
