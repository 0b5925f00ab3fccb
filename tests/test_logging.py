import logging

from placement.core.logging import REDACTED, RedactionProcessor, get_logger


def test_adapter_masks_contact_details(caplog):
    caplog.set_level(logging.INFO, logger="placement.tests")
    logger = get_logger("placement.tests").add_context(patient_email="ada@example.com")

    logger.info(
        "Contact updated",
        extra={"mobile": "0412345678", "approval_code": "2-163295213558", "bed_id": "bed-1"},
    )

    record = caplog.records[-1]
    assert record.mobile == REDACTED
    assert record.approval_code == REDACTED
    assert record.patient_email == REDACTED
    assert record.bed_id == "bed-1"


def test_structlog_processor_masks_contact_details():
    event = RedactionProcessor()(None, "info", {"event": "saved", "email": "ada@example.com", "client_uuid": "c"})

    assert event == {"event": "saved", "email": REDACTED, "client_uuid": "c"}
