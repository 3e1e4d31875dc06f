#!/usr/bin/env python3

from __future__ import annotations

from dataclasses import dataclass, field


def element(tag: str, node: type | None = None):
    """Bind a dataclass field to the child element with local name ``tag``.

    Leaves are strings defaulting to ``""``. Nested nodes default to an empty
    instance of ``node``, so a missing branch still yields a complete tree.
    """
    if node is None:
        return field(default="", metadata={"xml": tag})
    return field(default_factory=node, metadata={"xml": tag, "node": node})


def attribute(name: str):
    return field(default="", metadata={"attr": name})


def text():
    return field(default="", metadata={"text": True})


@dataclass(frozen=True)
class Field:
    category: str
    name: str
    value: str


@dataclass
class PartyInfo:
    name: str = element("Nm")


@dataclass
class AccountId:
    iban: str = element("IBAN")


@dataclass
class Account:
    id: AccountId = element("Id", AccountId)
    currency: str = element("Ccy")


@dataclass
class FinancialInstitutionId:
    bic: str = element("BIC")


@dataclass
class FinancialInstitution:
    fin_instn_id: FinancialInstitutionId = element(
        "FinInstnId", FinancialInstitutionId
    )


@dataclass
class GroupHeader:
    message_id: str = element("MsgId")
    creation_date_time: str = element("CreDtTm")
    number_of_txs: str = element("NbOfTxs")
    control_sum: str = element("CtrlSum")
    initiating_party: PartyInfo = element("InitgPty", PartyInfo)


@dataclass
class ServiceLevel:
    code: str = element("Cd")


@dataclass
class CategoryPurpose:
    code: str = element("Cd")


@dataclass
class PaymentTypeInfo:
    service_level: ServiceLevel = element("SvcLvl", ServiceLevel)
    category_purpose: CategoryPurpose = element("CtgyPurp", CategoryPurpose)


@dataclass
class PaymentId:
    end_to_end_id: str = element("EndToEndId")


@dataclass
class InstructedAmount:
    currency: str = attribute("Ccy")
    value: str = text()


@dataclass
class Amount:
    instructed_amount: InstructedAmount = element("InstdAmt", InstructedAmount)


@dataclass
class CodeOrProprietary:
    code: str = element("Cd")


@dataclass
class ReferenceType:
    code_or_proprietary: CodeOrProprietary = element("CdOrPrtry", CodeOrProprietary)
    issuer: str = element("Issr")


@dataclass
class CreditorReferenceInfo:
    type: ReferenceType = element("Tp", ReferenceType)
    reference: str = element("Ref")


@dataclass
class StructuredRemittance:
    creditor_ref_info: CreditorReferenceInfo = element(
        "CdtrRefInf", CreditorReferenceInfo
    )


@dataclass
class RemittanceInfo:
    structured: StructuredRemittance = element("Strd", StructuredRemittance)


@dataclass
class CreditTransferTxInfo:
    payment_id: PaymentId = element("PmtId", PaymentId)
    amount: Amount = element("Amt", Amount)
    creditor_agent: FinancialInstitution = element("CdtrAgt", FinancialInstitution)
    creditor: PartyInfo = element("Cdtr", PartyInfo)
    creditor_account: Account = element("CdtrAcct", Account)
    remittance_info: RemittanceInfo = element("RmtInf", RemittanceInfo)


@dataclass
class PaymentInfo:
    payment_info_id: str = element("PmtInfId")
    payment_method: str = element("PmtMtd")
    batch_booking: str = element("BtchBookg")
    number_of_txs: str = element("NbOfTxs")
    control_sum: str = element("CtrlSum")
    payment_type_info: PaymentTypeInfo = element("PmtTpInf", PaymentTypeInfo)
    requested_execution_date: str = element("ReqdExctnDt")
    debtor: PartyInfo = element("Dbtr", PartyInfo)
    debtor_account: Account = element("DbtrAcct", Account)
    debtor_agent: FinancialInstitution = element("DbtrAgt", FinancialInstitution)
    charge_bearer: str = element("ChrgBr")
    credit_transfer_tx_info: CreditTransferTxInfo = element(
        "CdtTrfTxInf", CreditTransferTxInfo
    )


@dataclass
class CustomerCreditTransfer:
    group_header: GroupHeader = element("GrpHdr", GroupHeader)
    payment_info: PaymentInfo = element("PmtInf", PaymentInfo)


@dataclass
class Document:
    """Root of the pain.001.001.03 subset shown by the viewer."""

    customer_credit_transfer: CustomerCreditTransfer = element(
        "CstmrCdtTrfInitn", CustomerCreditTransfer
    )
