#!/usr/bin/env python3

from __future__ import annotations

import random
import string
import xml.etree.ElementTree as ET

PAIN_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:pain.001.001.03"

AMOUNT_CURRENCY = "PmtInf/CdtTrfTxInf/Amt/InstdAmt@Ccy"

# path below Document/CstmrCdtTrfInitn -> value; "@" separates an attribute
DEFAULT_VALUES = {
    "GrpHdr/MsgId": "MSG-2024-0001",
    "GrpHdr/CreDtTm": "2024-03-15T10:30:00",
    "GrpHdr/NbOfTxs": "1",
    "GrpHdr/CtrlSum": "1500.00",
    "GrpHdr/InitgPty/Nm": "Muster GmbH",
    "PmtInf/PmtInfId": "PMT-0001",
    "PmtInf/PmtMtd": "TRF",
    "PmtInf/BtchBookg": "true",
    "PmtInf/NbOfTxs": "1",
    "PmtInf/CtrlSum": "1500.00",
    "PmtInf/PmtTpInf/SvcLvl/Cd": "SEPA",
    "PmtInf/PmtTpInf/CtgyPurp/Cd": "SUPP",
    "PmtInf/ReqdExctnDt": "2024-03-18",
    "PmtInf/Dbtr/Nm": "Muster GmbH",
    "PmtInf/DbtrAcct/Id/IBAN": "DE89370400440532013000",
    "PmtInf/DbtrAcct/Ccy": "EUR",
    "PmtInf/DbtrAgt/FinInstnId/BIC": "COBADEFFXXX",
    "PmtInf/ChrgBr": "SLEV",
    "PmtInf/CdtTrfTxInf/PmtId/EndToEndId": "E2E-0001",
    "PmtInf/CdtTrfTxInf/Amt/InstdAmt": "1500.00",
    AMOUNT_CURRENCY: "EUR",
    "PmtInf/CdtTrfTxInf/CdtrAgt/FinInstnId/BIC": "DEUTDEFFXXX",
    "PmtInf/CdtTrfTxInf/Cdtr/Nm": "Lieferant AG",
    "PmtInf/CdtTrfTxInf/CdtrAcct/Id/IBAN": "DE02120300000000202051",
    "PmtInf/CdtTrfTxInf/RmtInf/Strd/CdtrRefInf/Tp/CdOrPrtry/Cd": "SCOR",
    "PmtInf/CdtTrfTxInf/RmtInf/Strd/CdtrRefInf/Tp/Issr": "ISO",
    "PmtInf/CdtTrfTxInf/RmtInf/Strd/CdtrRefInf/Ref": "RF18539007547034",
}


def random_string(size: int, letters: bool = False, digits: bool = False):
    population = ""
    if letters:
        population += string.ascii_uppercase
    if digits:
        population += string.digits
    return "".join(random.choices(population=population, k=size))


def fake_iban():
    return "DE" + random_string(size=20, digits=True)


def fake_bic():
    return random_string(size=4, letters=True) + "DE" + random_string(size=2, letters=True)


def make_document(
    values: dict[str, str] | None = None,
    omit: tuple[str, ...] = (),
    namespace: str | None = PAIN_NAMESPACE,
) -> bytes:
    """Build a pain.001.001.03 document from DEFAULT_VALUES updated by ``values``."""
    merged = {**DEFAULT_VALUES, **(values or {})}

    def tag(name):
        return f"{{{namespace}}}{name}" if namespace else name

    def child(parent, name):
        for existing in parent:
            if existing.tag == tag(name):
                return existing
        return ET.SubElement(parent, tag(name))

    root = ET.Element(tag("Document"))
    initiation = ET.SubElement(root, tag("CstmrCdtTrfInitn"))
    for path, value in merged.items():
        if path in omit:
            continue
        path, _, attr = path.partition("@")
        node = initiation
        for name in path.split("/"):
            node = child(node, name)
        if attr:
            node.set(attr, value)
        else:
            node.text = value

    return ET.tostring(root, encoding="utf-8", xml_declaration=True)
