from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Contract',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('tenant', models.CharField(db_index=True, max_length=100)),
                ('tenant_document', models.CharField(max_length=20, verbose_name='CPF/CNPJ')),
                ('tenant_email', models.EmailField(blank=True, max_length=254)),
                ('tenant_phone', models.CharField(blank=True, max_length=20)),
                ('tenant_type', models.CharField(choices=[('pf', 'Pessoa Física'), ('pj', 'Pessoa Jurídica')], default='pf', max_length=2)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('due_day', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ('status', models.CharField(choices=[('active', 'Ativo'), ('expired', 'Expirado'), ('cancelled', 'Cancelado')], db_index=True, default='active', max_length=20)),
                ('rent_value', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('rent_base_value', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('iptu_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('condominium_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('iptu_reimbursable', models.BooleanField(default=False)),
                ('condominium_reimbursable', models.BooleanField(default=False)),
                ('iva_ibs_subject', models.BooleanField(default=True)),
                ('iva_ibs_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0.00')), django.core.validators.MaxValueValidator(Decimal('100.00'))])),
                ('notes', models.TextField(blank=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='contracts', to='properties.property')),
            ],
            options={
                'db_table': 'contracts',
                'ordering': ['-start_date'],
                'indexes': [models.Index(fields=['property', 'status'], name='contract_property_status_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('end_date__gte', models.F('start_date'))), name='contract_end_after_start'),
                    models.CheckConstraint(condition=models.Q(('due_day__gte', 1), ('due_day__lte', 31)), name='contract_due_day_range'),
                ],
            },
        ),
    ]
