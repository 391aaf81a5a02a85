from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('address', models.CharField(db_index=True, max_length=255)),
                ('type', models.CharField(choices=[('apartment', 'Apartamento'), ('house', 'Casa'), ('commercial', 'Comercial'), ('land', 'Terreno')], db_index=True, default='apartment', max_length=20)),
                ('description', models.TextField(blank=True)),
                ('owner', models.CharField(max_length=100)),
                ('owner_document', models.CharField(max_length=20, verbose_name='CPF/CNPJ')),
                ('rent_value', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Imóvel',
                'verbose_name_plural': 'Imóveis',
                'db_table': 'properties',
                'ordering': ['address'],
                'indexes': [models.Index(fields=['user', 'type'], name='property_user_type_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('rent_value__gte', 0)), name='property_rent_value_non_negative')],
            },
        ),
    ]
