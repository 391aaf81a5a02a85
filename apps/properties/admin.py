from django.contrib import admin

from apps.contracts.models import Contract
from .models import Property


# 인라인 설정: 부동산 상세 페이지 하단에 '연결된 계약 목록'을 바로 보여줌
class ContractInline(admin.TabularInline):
    model = Contract
    extra = 0  # 빈 줄 추가 안 함
    fields = ['tenant', 'start_date', 'end_date', 'rent_value', 'status']
    can_delete = False  # 계약은 상세 페이지에서만 삭제
    show_change_link = True


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    """
    부동산 관리 (Property)
    """
    list_display = [
        'address',
        'type',
        'owner',
        'get_masked_document',
        'rent_value',
        'get_contract_count',
        'user',
        'created_at',
    ]

    list_filter = ['type']

    # 검색 (주소, 소유자, 소유자 문서, 임대인 아이디)
    search_fields = ['address', 'owner', 'owner_document', 'user__username']

    fieldsets = [
        ('Imóvel', {
            'fields': ('user', 'address', 'type', 'description', 'rent_value')
        }),
        ('Proprietário', {
            'fields': ('owner', 'owner_document')
        }),
    ]

    inlines = [ContractInline]

    @admin.display(description='CPF/CNPJ')
    def get_masked_document(self, obj):
        return obj.get_masked_owner_document()

    @admin.display(description='Contratos')
    def get_contract_count(self, obj):
        return obj.contracts.count()
