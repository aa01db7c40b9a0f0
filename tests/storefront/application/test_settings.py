from storefront.settings import DEFAULT_ADMIN_EMAILS, Settings, load_settings


def test_defaults_run_demo_mode(monkeypatch):
    for name in ("STORE_ADAPTER", "EMAIL_ADAPTER", "STOCK_POLICY", "ADMIN_EMAILS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.store_adapter == "memory"
    assert settings.email_adapter == "fake"
    assert settings.stock_policy == "guarded"
    assert settings.admin_emails == DEFAULT_ADMIN_EMAILS


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STOCK_POLICY", "clamp")
    monkeypatch.setenv("ADMIN_EMAILS", "boss@catzo.com, ops@catzo.com")
    monkeypatch.setenv("EMAIL_ADAPTER", "emailjs")
    monkeypatch.setenv("EMAILJS_SERVICE_ID", "service_x")

    settings = load_settings()
    assert settings.stock_policy == "clamp"
    assert settings.admin_emails == ("boss@catzo.com", "ops@catzo.com")
    assert settings.emailjs["service_id"] == "service_x"


def test_admin_check_is_case_insensitive():
    settings = Settings(admin_emails=("admin@catzo.com",))
    assert settings.is_admin("Admin@Catzo.com")
    assert not settings.is_admin("asha@example.com")
    assert not settings.is_admin(None)
