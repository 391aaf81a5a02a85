from django.contrib import admin
from django.utils.html import format_html

from apps.payments.models import Payment
from .models import Contract


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ['reference_month', 'due_date', 'payment_date', 'value']
    can_delete = False
    show_change_link = True


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    """
    계약 관리 (Contract)
    """
    list_display = [
        'tenant',
        'property',
        'tenant_type',
        'start_date',
        'end_date',
        'get_rent_display',
        'get_status_colored',
    ]

    date_hierarchy = 'start_date'

    list_filter = ['status', 'tenant_type', 'iptu_reimbursable', 'condominium_reimbursable', 'iva_ibs_subject']

    search_fields = ['tenant', 'tenant_document', 'tenant_email', 'property__address']

    fieldsets = [
        ('Inquilino', {
            'fields': ('property', 'tenant', 'tenant_document', 'tenant_email', 'tenant_phone', 'tenant_type')
        }),
        ('Vigência', {
            'fields': ('start_date', 'end_date', 'due_day', 'status')
        }),
        ('Composição do aluguel', {
            'fields': (
                'rent_value', 'rent_base_value', 'iptu_value', 'iptu_reimbursable',
                'condominium_value', 'condominium_reimbursable',
            )
        }),
        ('IVA/IBS', {
            'fields': ('iva_ibs_subject', 'iva_ibs_rate')
        }),
        ('Observações', {
            'fields': ('notes',)
        }),
    ]

    inlines = [PaymentInline]

    @admin.display(description='Aluguel', ordering='rent_value')
    def get_rent_display(self, obj):
        return f"R$ {obj.rent_value:,.2f}"

    @admin.display(description='Status', ordering='status')
    def get_status_colored(self, obj):
        colors = {'active': 'green', 'expired': 'gray', 'cancelled': 'red'}
        return format_html(
            '<span style="color:{}; font-weight:bold;">{}</span>',
            colors.get(obj.status, 'black'),
            obj.get_status_display()
        )
