import apps.company.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CompanyProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company_name", models.CharField(max_length=255)),
                ("tagline", models.CharField(blank=True, max_length=255)),
                ("address", models.TextField(blank=True)),
                ("gstin", models.CharField(blank=True, help_text="GST Identification Number", max_length=15)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("state_code", models.CharField(blank=True, max_length=2)),
                ("phone", models.CharField(blank=True, max_length=50)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("bank_name", models.CharField(blank=True, max_length=255)),
                ("bank_account_number", models.CharField(blank=True, max_length=50)),
                ("bank_ifsc", models.CharField(blank=True, help_text="Branch IFSC code", max_length=20)),
                ("jurisdiction", models.CharField(blank=True, help_text="City named in 'Subject to ... Jurisdiction'", max_length=100)),
                ("terms", models.JSONField(blank=True, default=list, help_text="Terms and conditions, one entry per line")),
                ("default_cgst_rate", models.DecimalField(decimal_places=2, default=9, max_digits=5)),
                ("default_sgst_rate", models.DecimalField(decimal_places=2, default=9, max_digits=5)),
                ("invoice_number_pattern", models.CharField(default="INV-{NNNN}", help_text="Pattern with placeholders: {YYYY}, {YY}, {MM}, {NNN}, {NNNN}, {NNNNN}", max_length=100)),
                ("logo", models.FileField(blank=True, null=True, upload_to=apps.company.models.company_image_upload_path)),
                ("signature", models.FileField(blank=True, null=True, upload_to=apps.company.models.company_image_upload_path)),
            ],
            options={
                "verbose_name": "Company Profile",
                "verbose_name_plural": "Company Profile",
            },
        ),
    ]
