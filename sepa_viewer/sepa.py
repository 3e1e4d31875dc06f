#!/usr/bin/env python3

from __future__ import annotations

import io
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import fields
from datetime import datetime
from os import PathLike

from sepa_viewer.models import Document, Field

logger = logging.getLogger(__name__)

GROUP_HEADER = "Group Header"
PAYMENT_INFO = "Payment Info"
DEBTOR = "Debtor"
TRANSACTION = "Transaction"
CREDITOR = "Creditor"
REMITTANCE = "Remittance"

CATEGORIES = (GROUP_HEADER, PAYMENT_INFO, DEBTOR, TRANSACTION, CREDITOR, REMITTANCE)

ROOT_TAG = "Document"
SOURCE_DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
# two-digit fields, optional fractional seconds after "." or ","
SOURCE_DATE_TIME_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}([.,][0-9]+)?"
)
DISPLAY_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class ParseError(Exception):
    """Reading or decoding a SEPA document failed."""


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element | None, tag: str) -> ET.Element | None:
    """Return the first direct child with local name ``tag``, ignoring namespaces."""
    if element is None:
        return None
    for child in element:
        if isinstance(child.tag, str) and local_name(child.tag) == tag:
            return child
    return None


def chardata(element: ET.Element) -> str:
    """Character data directly inside ``element``, skipping nested elements."""
    return (element.text or "") + "".join(child.tail or "" for child in element)


def decode_node(cls, element: ET.Element | None):
    if element is None:
        return cls()

    values = {}
    for f in fields(cls):
        if "attr" in f.metadata:
            values[f.name] = element.get(f.metadata["attr"], "")
        elif f.metadata.get("text"):
            values[f.name] = chardata(element)
        else:
            child = find_child(element, f.metadata["xml"])
            node = f.metadata.get("node")
            if node is not None:
                values[f.name] = decode_node(node, child)
            else:
                values[f.name] = "" if child is None else chardata(child)
    return cls(**values)


def decode_document(data: bytes) -> Document:
    try:
        root = ET.parse(io.BytesIO(data)).getroot()
    except ET.ParseError as e:
        raise ParseError(f"failed to parse XML: {e}") from e

    if local_name(root.tag) != ROOT_TAG:
        raise ParseError(
            f"failed to parse XML: expected element <{ROOT_TAG}> "
            f"but have <{local_name(root.tag)}>"
        )
    return decode_node(Document, root)


def format_date_time(value: str) -> str:
    """Reformat ``YYYY-MM-DDTHH:MM:SS`` for display, passing anything else through."""
    if not SOURCE_DATE_TIME_PATTERN.fullmatch(value):
        logger.debug(f"Keeping unparseable date time {value=}")
        return value
    try:
        parsed = datetime.strptime(value[:19], SOURCE_DATE_TIME_FORMAT)
    except ValueError:
        logger.debug(f"Keeping out of range date time {value=}")
        return value
    return parsed.strftime(DISPLAY_DATE_TIME_FORMAT)


def to_fields(document: Document) -> list[Field]:
    header = document.customer_credit_transfer.group_header
    pmt_info = document.customer_credit_transfer.payment_info
    tx_info = pmt_info.credit_transfer_tx_info
    amount = tx_info.amount.instructed_amount
    ref_info = tx_info.remittance_info.structured.creditor_ref_info

    return [
        Field(GROUP_HEADER, "Message ID", header.message_id),
        Field(
            GROUP_HEADER,
            "Creation Date Time",
            format_date_time(header.creation_date_time),
        ),
        Field(GROUP_HEADER, "Number of Transactions", header.number_of_txs),
        Field(GROUP_HEADER, "Control Sum", header.control_sum),
        Field(GROUP_HEADER, "Initiating Party", header.initiating_party.name),
        Field(PAYMENT_INFO, "Payment Info ID", pmt_info.payment_info_id),
        Field(PAYMENT_INFO, "Payment Method", pmt_info.payment_method),
        Field(PAYMENT_INFO, "Batch Booking", pmt_info.batch_booking),
        Field(PAYMENT_INFO, "Number of Transactions", pmt_info.number_of_txs),
        Field(PAYMENT_INFO, "Control Sum", pmt_info.control_sum),
        Field(
            PAYMENT_INFO,
            "Service Level",
            pmt_info.payment_type_info.service_level.code,
        ),
        Field(
            PAYMENT_INFO,
            "Category Purpose",
            pmt_info.payment_type_info.category_purpose.code,
        ),
        Field(
            PAYMENT_INFO, "Requested Execution Date", pmt_info.requested_execution_date
        ),
        Field(PAYMENT_INFO, "Charge Bearer", pmt_info.charge_bearer),
        Field(DEBTOR, "Name", pmt_info.debtor.name),
        Field(DEBTOR, "IBAN", pmt_info.debtor_account.id.iban),
        Field(DEBTOR, "Currency", pmt_info.debtor_account.currency),
        Field(DEBTOR, "BIC", pmt_info.debtor_agent.fin_instn_id.bic),
        Field(TRANSACTION, "End to End ID", tx_info.payment_id.end_to_end_id),
        Field(TRANSACTION, f"Amount ({amount.currency})", amount.value),
        Field(CREDITOR, "Name", tx_info.creditor.name),
        Field(CREDITOR, "IBAN", tx_info.creditor_account.id.iban),
        Field(CREDITOR, "BIC", tx_info.creditor_agent.fin_instn_id.bic),
        Field(
            REMITTANCE, "Reference Type", ref_info.type.code_or_proprietary.code
        ),
        Field(REMITTANCE, "Issuer", ref_info.type.issuer),
        Field(REMITTANCE, "Reference", ref_info.reference),
    ]


def parse(data: bytes) -> list[Field]:
    document = decode_document(data)
    sepa_fields = to_fields(document)
    logger.debug(f"Flattened document into {len(sepa_fields)} fields")
    return sepa_fields


def parse_file(path: str | PathLike) -> list[Field]:
    logger.info(f"Reading {path}")
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ParseError(f"failed to read file: {e}") from e
    return parse(data)
