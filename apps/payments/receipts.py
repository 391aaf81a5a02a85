"""
납부 영수증 PDF 생성 (fpdf2)

- 납부 완료된 건만 발행 (뷰에서 검사)
- 금액 표기: 브라질 형식 (R$ 1.234,56)
- 코어 폰트(Helvetica)는 Latin-1만 지원하므로 텍스트를 Latin-1로 정리
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from apps.tax.utils import TENANT_INDIVIDUAL, calculate_payment_taxes

logger = logging.getLogger(__name__)


def format_brl(value):
    """Decimal → 'R$ 1.234,56'"""
    amount = Decimal(value or 0).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    text = f"{amount:,.2f}".replace(',', 'X').replace('.', ',').replace('X', '.')
    return f"R$ {text}"


def format_date(value):
    return value.strftime('%d/%m/%Y') if value else '-'


def _latin1(text):
    return str(text).encode('latin-1', 'replace').decode('latin-1')


class ReceiptPDF(FPDF):
    """영수증 레이아웃 (섹션 제목 + 한 줄 항목)"""

    def section(self, title):
        self.ln(4)
        self.set_font('Helvetica', 'B', 12)
        self.line_text(title)
        self.set_font('Helvetica', '', 10)

    def line_text(self, text, height=6, align='L'):
        self.cell(0, height, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT, align=align)


def generate_receipt(payment):
    """
    납부 영수증 PDF 생성

    Args:
        payment: 납부 완료된 Payment (contract, contract.property 포함)

    Returns:
        bytes: PDF 파일 내용
    """
    contract = payment.contract
    prop = contract.property
    taxes = calculate_payment_taxes(payment, contract)
    is_individual = contract.tenant_type == TENANT_INDIVIDUAL

    pdf = ReceiptPDF(format='A4')
    pdf.set_margins(20, 20, 20)
    pdf.add_page()

    pdf.set_font('Helvetica', 'B', 18)
    pdf.line_text('RECIBO DE ALUGUEL', height=12, align='C')

    pdf.set_font('Helvetica', '', 10)
    pdf.line_text(f"Recibo Nº: {payment.pk:08d}", align='R')
    pdf.line_text(f"Data: {format_date(timezone.localdate())}", align='R')

    pdf.section('LOCADOR (Quem recebe):')
    pdf.line_text(f"Nome: {prop.owner}")
    pdf.line_text(f"CPF/CNPJ: {prop.owner_document}")

    pdf.section('LOCATÁRIO (Quem paga):')
    pdf.line_text(f"Nome: {contract.tenant}")
    pdf.line_text(f"CPF/CNPJ: {contract.tenant_document}")
    pdf.line_text(f"Tipo: {contract.get_tenant_type_display()}")
    if contract.tenant_email:
        pdf.line_text(f"Email: {contract.tenant_email}")
    if contract.tenant_phone:
        pdf.line_text(f"Telefone: {contract.tenant_phone}")

    pdf.section('IMÓVEL:')
    pdf.line_text(f"Endereço: {prop.address}")

    pdf.section('REFERENTE A:')
    pdf.line_text(f"Período: {payment.reference_month}")
    pdf.line_text(f"Vencimento: {format_date(payment.due_date)}")
    pdf.line_text(f"Pagamento: {format_date(payment.payment_date)}")
    if payment.payment_method:
        pdf.line_text(f"Forma: {payment.get_payment_method_display()}")

    pdf.section('DISCRIMINAÇÃO DE VALORES:')
    pdf.line_text(f"Aluguel: {format_brl(payment.rent_amount or payment.value)}")
    if payment.iptu_amount > 0:
        label = 'IPTU (Reembolso)' if contract.iptu_reimbursable else 'IPTU'
        pdf.line_text(f"{label}: {format_brl(payment.iptu_amount)}")
    if payment.condominium_amount > 0:
        label = 'Condomínio (Reembolso)' if contract.condominium_reimbursable else 'Condomínio'
        pdf.line_text(f"{label}: {format_brl(payment.condominium_amount)}")
    if payment.other_charges > 0:
        pdf.line_text(f"Outras despesas: {format_brl(payment.other_charges)}")

    pdf.ln(2)
    pdf.set_font('Helvetica', 'BU', 11)
    pdf.line_text(f"VALOR TOTAL: {format_brl(taxes['gross_income'])}")

    if is_individual or taxes['iva_ibs_value'] > 0:
        pdf.section('INFORMAÇÕES TRIBUTÁRIAS:')
        if taxes['reimbursements'] > 0:
            pdf.line_text(f"Reembolsos (não tributáveis): {format_brl(taxes['reimbursements'])}")
            pdf.line_text(f"Renda de aluguel: {format_brl(taxes['rent_income'])}")
        if is_individual and taxes['ir_value'] > 0:
            pdf.line_text(f"Base de cálculo IR: {format_brl(taxes['taxable_income'])} (80%)")
            pdf.line_text(f"Alíquota IR: {taxes['ir_rate_percent']:g}%")
            pdf.line_text(f"IR (Carnê-Leão): {format_brl(taxes['ir_value'])}")
        if taxes['iva_ibs_value'] > 0:
            pdf.line_text(f"IVA/IBS ({taxes['iva_ibs_rate']:g}%): {format_brl(taxes['iva_ibs_value'])}")

        pdf.ln(2)
        pdf.set_font('Helvetica', 'BU', 11)
        pdf.line_text(f"VALOR LÍQUIDO: {format_brl(taxes['net_income'])}")

    if payment.notes:
        pdf.section('OBSERVAÇÕES:')
        pdf.multi_cell(0, 5, _latin1(payment.notes), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.ln(16)
    pdf.set_font('Helvetica', '', 8)
    pdf.line_text('_' * 60, align='C')
    pdf.line_text('Assinatura do Locador', align='C')

    pdf.ln(4)
    pdf.set_font('Helvetica', 'I', 7)
    pdf.line_text('Recibo gerado automaticamente pelo Sistema de Gestão de Aluguéis', height=4, align='C')
    if is_individual:
        pdf.line_text('Carnê-Leão (IRPF) deve ser recolhido mensalmente', height=4, align='C')
    if taxes['iva_ibs_value'] > 0:
        pdf.line_text('IVA/IBS - Reforma Tributária (estimativa)', height=4, align='C')

    logger.debug(f"영수증 PDF 생성: payment={payment.pk}")
    return bytes(pdf.output())
