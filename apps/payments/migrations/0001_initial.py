from decimal import Decimal

import apps.payments.models
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contracts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reference_month', models.CharField(db_index=True, max_length=7, validators=[django.core.validators.RegexValidator(message='Mês de referência deve estar no formato AAAA-MM', regex='^\\d{4}-(0[1-9]|1[0-2])$')])),
                ('due_date', models.DateField(db_index=True)),
                ('payment_date', models.DateField(blank=True, db_index=True, null=True)),
                ('value', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('rent_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('iptu_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('condominium_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('other_charges', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('ir_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('iva_ibs_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('payment_method', models.CharField(blank=True, choices=[('pix', 'PIX'), ('transfer', 'Transferência'), ('boleto', 'Boleto'), ('cash', 'Dinheiro'), ('card', 'Cartão'), ('other', 'Outro')], max_length=20)),
                ('receipt_type', models.CharField(choices=[('rent', 'Aluguel'), ('deposit', 'Caução'), ('other', 'Outro')], default='rent', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('contract', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='contracts.contract')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-due_date'],
                'indexes': [
                    models.Index(fields=['contract', 'reference_month'], name='payment_contract_month_idx'),
                    models.Index(fields=['payment_date', 'due_date'], name='payment_paid_due_idx'),
                ],
                'constraints': [models.CheckConstraint(condition=models.Q(('value__gt', 0)), name='payment_value_positive')],
            },
        ),
        migrations.CreateModel(
            name='PaymentAttachment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('file', models.FileField(upload_to=apps.payments.models.attachment_upload_path, validators=[django.core.validators.FileExtensionValidator(allowed_extensions=['jpg', 'jpeg', 'png', 'pdf'])])),
                ('original_name', models.CharField(max_length=255)),
                ('size', models.PositiveIntegerField()),
                ('content_type', models.CharField(max_length=100)),
                ('payment', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='attachment', to='payments.payment')),
            ],
            options={
                'db_table': 'payment_attachments',
                'ordering': ['-created_at'],
            },
        ),
    ]
