"""
Pytest configuration y helpers para tests de PAN Validation
"""
from datetime import date
from typing import Dict, Optional

import pytest

from kra_check.environment import Environment
from kra_check.test_cases import TestCase, smoke_test_cases

FIXED_DAY = date(2024, 3, 15)


def pytest_configure(config):
    """Registra markers personalizados"""
    config.addinivalue_line(
        "markers", "cli: tests que ejecutan kra_check.cli.main"
    )


def build_success_body(
    prefix: str = "soap",
    pan_no: str = "OVSWF8950H",
    okra_code: str = "CVL",
    okra_batch: str = "1234",
    total_rec: str = "1",
    response_date: str = "15-03-2024 10:22:31",
    app_status: Optional[str] = None,
    include_root: bool = True,
) -> str:
    """Respuesta PANValidation exitosa con el dialecto `prefix`"""
    ns = {
        "soap": "http://schemas.xmlsoap.org/soap/envelope/",
        "soap12": "http://www.w3.org/2003/05/soap-envelope",
    }[prefix]
    status_xml = f"<APP_STATUS>{app_status}</APP_STATUS>" if app_status is not None else ""
    root_xml = f"""
        <APP_RES_ROOT>
          <APP_PAN_INQ>
            <APP_PAN_NO>{pan_no}</APP_PAN_NO>
            <APP_NAME>TEST USER</APP_NAME>
            {status_xml}
          </APP_PAN_INQ>
          <APP_PAN_SUMM>
            <APP_OTHKRA_CODE>{okra_code}</APP_OTHKRA_CODE>
            <APP_OTHKRA_BATCH>{okra_batch}</APP_OTHKRA_BATCH>
            <APP_REQ_DATE>15-03-2024</APP_REQ_DATE>
            <APP_RESPONSE_DATE>{response_date}</APP_RESPONSE_DATE>
            <APP_TOTAL_REC>{total_rec}</APP_TOTAL_REC>
          </APP_PAN_SUMM>
        </APP_RES_ROOT>""" if include_root else "<APP_ERROR_DESC>no data</APP_ERROR_DESC>"
    return f"""<?xml version="1.0" encoding="utf-8"?>
<{prefix}:Envelope xmlns:{prefix}="{ns}" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <{prefix}:Body>
    <PANValidationResponse xmlns="https://pancheck.www.kracvl.com/">
      <PANValidationResult>{root_xml}
      </PANValidationResult>
    </PANValidationResponse>
  </{prefix}:Body>
</{prefix}:Envelope>"""


def build_error_body(code: str = "WEBERR-999", prefix: str = "soap") -> str:
    ns = {
        "soap": "http://schemas.xmlsoap.org/soap/envelope/",
        "soap12": "http://www.w3.org/2003/05/soap-envelope",
    }[prefix]
    return f"""<?xml version="1.0" encoding="utf-8"?>
<{prefix}:Envelope xmlns:{prefix}="{ns}">
  <{prefix}:Body>
    <PANValidationResponse xmlns="https://pancheck.www.kracvl.com/">
      <PANValidationResult>{code}|Invalid PAN number</PANValidationResult>
    </PANValidationResponse>
  </{prefix}:Body>
</{prefix}:Envelope>"""


def build_password_body(password: Optional[str] = "Pw$2024#abc", prefix: str = "soap") -> str:
    ns = {
        "soap": "http://schemas.xmlsoap.org/soap/envelope/",
        "soap12": "http://www.w3.org/2003/05/soap-envelope",
    }[prefix]
    result = f"<GetPasswordResult>{password}</GetPasswordResult>" if password is not None else ""
    return f"""<?xml version="1.0" encoding="utf-8"?>
<{prefix}:Envelope xmlns:{prefix}="{ns}">
  <{prefix}:Body>
    <GetPasswordResponse xmlns="https://pancheck.www.kracvl.com/">{result}</GetPasswordResponse>
  </{prefix}:Body>
</{prefix}:Envelope>"""


@pytest.fixture
def smoke_cases() -> Dict[str, TestCase]:
    return smoke_test_cases(FIXED_DAY)


@pytest.fixture
def environment() -> Environment:
    return Environment()


@pytest.fixture(autouse=True)
def clean_kra_env(monkeypatch):
    """Aísla los tests de variables KRA_CHECK_* del entorno (o .env)"""
    for name in ("KRA_CHECK_SMOKE_MAX_MS", "KRA_CHECK_REGRESSION_MAX_MS",
                 "KRA_CHECK_LOG_LEVEL", "KRA_CHECK_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
