from django.contrib import admin
from django.utils.html import format_html

from .models import STATUS_OVERDUE, STATUS_PAID, Payment, PaymentAttachment


def format_size(size):
    if size is None:
        return "0 B"
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class PaymentAttachmentInline(admin.TabularInline):
    model = PaymentAttachment
    extra = 0
    fields = ['original_name', 'get_size_display', 'created_at']
    readonly_fields = ['original_name', 'get_size_display', 'created_at']
    can_delete = True
    show_change_link = True

    @admin.display(description='Tamanho')
    def get_size_display(self, obj):
        return format_size(obj.size)


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    납부 관리 (Pagamento)
    """
    list_display = [
        'reference_month',
        'contract',
        'due_date',
        'payment_date',
        'get_value_display',
        'get_status_colored',
    ]

    date_hierarchy = 'due_date'

    list_filter = ['payment_method', 'receipt_type', 'reference_month']

    search_fields = ['contract__tenant', 'contract__property__address', 'reference_month', 'notes']

    readonly_fields = ['ir_value', 'iva_ibs_value']

    fieldsets = [
        ('Pagamento', {
            'fields': ('contract', 'reference_month', 'due_date', 'payment_date', 'value')
        }),
        ('Composição', {
            'fields': ('rent_amount', 'iptu_amount', 'condominium_amount', 'other_charges')
        }),
        ('Impostos (calculado)', {
            'fields': ('ir_value', 'iva_ibs_value')
        }),
        ('Detalhes', {
            'fields': ('payment_method', 'receipt_type', 'notes')
        }),
    ]

    inlines = [PaymentAttachmentInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('contract', 'contract__property')

    @admin.display(description='Valor', ordering='value')
    def get_value_display(self, obj):
        return f"R$ {obj.value:,.2f}"

    @admin.display(description='Status')
    def get_status_colored(self, obj):
        colors = {STATUS_PAID: 'green', STATUS_OVERDUE: 'red'}
        return format_html(
            '<span style="color:{}; font-weight:bold;">{}</span>',
            colors.get(obj.status, 'orange'),
            obj.get_status_display()
        )


@admin.register(PaymentAttachment)
class PaymentAttachmentAdmin(admin.ModelAdmin):
    list_display = ['original_name', 'get_size_display', 'payment', 'created_at']
    list_filter = ['created_at', 'content_type']
    search_fields = ['original_name', 'payment__contract__tenant']

    @admin.display(description='Tamanho', ordering='size')
    def get_size_display(self, obj):
        return format_size(obj.size)
