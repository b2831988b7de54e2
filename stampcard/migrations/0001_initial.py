# Initial stampcard schema

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "code",
                    models.CharField(
                        help_text="User id issued by the identity provider",
                        max_length=128,
                        unique=True,
                        verbose_name="code",
                    ),
                ),
                ("display_name", models.CharField(blank=True, max_length=200, verbose_name="display name")),
                ("email", models.EmailField(blank=True, db_index=True, max_length=254, verbose_name="email")),
                (
                    "user_type",
                    models.CharField(
                        choices=[("customer", "Customer"), ("business", "Business")],
                        default="customer",
                        max_length=20,
                        verbose_name="user type",
                    ),
                ),
                ("push_token", models.CharField(blank=True, max_length=255, verbose_name="push token")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "profile",
                "verbose_name_plural": "profiles",
                "ordering": ["display_name"],
            },
        ),
        migrations.CreateModel(
            name="Business",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                ("logo_url", models.URLField(blank=True, max_length=500, verbose_name="logo")),
                ("address", models.CharField(blank=True, max_length=300, verbose_name="address")),
                ("phone", models.CharField(blank=True, max_length=30, verbose_name="phone")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="businesses",
                        to="stampcard.profile",
                        verbose_name="owner",
                    ),
                ),
            ],
            options={
                "verbose_name": "business",
                "verbose_name_plural": "businesses",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="LoyaltyProgram",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "total_slots",
                    models.PositiveIntegerField(
                        help_text="Stamps needed to earn the reward",
                        verbose_name="total slots",
                    ),
                ),
                ("reward_description", models.CharField(max_length=300, verbose_name="reward")),
                (
                    "stamp_description",
                    models.CharField(
                        blank=True,
                        help_text="What earns a stamp (e.g. one coffee)",
                        max_length=300,
                        verbose_name="stamp description",
                    ),
                ),
                ("card_color", models.CharField(blank=True, max_length=20, verbose_name="card color")),
                (
                    "stamp_shape",
                    models.CharField(
                        choices=[
                            ("circle", "Circle"),
                            ("square", "Square"),
                            ("star", "Star"),
                            ("heart", "Heart"),
                        ],
                        default="circle",
                        max_length=20,
                        verbose_name="stamp shape",
                    ),
                ),
                ("background_image", models.URLField(blank=True, max_length=500, verbose_name="background image")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("deactivated_at", models.DateTimeField(blank=True, null=True, verbose_name="deactivated at")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="programs",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
            ],
            options={
                "verbose_name": "loyalty program",
                "verbose_name_plural": "loyalty programs",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_slots__gte", 1)),
                        name="stampcard_program_slots_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CustomerCard",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("current_stamps", models.PositiveIntegerField(default=0, verbose_name="current stamps")),
                ("reward_claimed", models.BooleanField(db_index=True, default=False, verbose_name="reward claimed")),
                ("reward_claimed_at", models.DateTimeField(blank=True, null=True, verbose_name="reward claimed at")),
                ("code", models.CharField(db_index=True, max_length=3, verbose_name="code")),
                (
                    "customer_name",
                    models.CharField(
                        blank=True,
                        help_text="Display name at enrollment time",
                        max_length=200,
                        verbose_name="customer name",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("last_stamp_at", models.DateTimeField(blank=True, null=True, verbose_name="last stamp at")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="stampcard.profile",
                        verbose_name="customer",
                    ),
                ),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="stampcard.loyaltyprogram",
                        verbose_name="program",
                    ),
                ),
            ],
            options={
                "verbose_name": "customer card",
                "verbose_name_plural": "customer cards",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["business", "code", "reward_claimed"], name="stampcard_card_code_idx"),
                    models.Index(fields=["customer", "-created_at"], name="stampcard_card_customer_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("reward_claimed", False)),
                        fields=("customer", "program"),
                        name="stampcard_one_open_card_per_program",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CodeReservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=3, verbose_name="code")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="code_reservations",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
                (
                    "card",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservation",
                        to="stampcard.customercard",
                        verbose_name="card",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="code_reservations",
                        to="stampcard.profile",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "code reservation",
                "verbose_name_plural": "code reservations",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business", "code"),
                        name="stampcard_unique_code_per_business",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StampEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(db_index=True, verbose_name="created at")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stamp_events",
                        to="stampcard.customercard",
                        verbose_name="card",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.profile",
                        verbose_name="customer",
                    ),
                ),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.loyaltyprogram",
                        verbose_name="program",
                    ),
                ),
            ],
            options={
                "verbose_name": "stamp",
                "verbose_name_plural": "stamps",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["card", "-created_at"], name="stampcard_stamp_card_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RewardEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("claimed_at", models.DateTimeField(db_index=True, verbose_name="claimed at")),
                ("is_redeemed", models.BooleanField(default=True, verbose_name="redeemed")),
                ("note", models.CharField(blank=True, max_length=300, verbose_name="note")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reward_events",
                        to="stampcard.customercard",
                        verbose_name="card",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.profile",
                        verbose_name="customer",
                    ),
                ),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.loyaltyprogram",
                        verbose_name="program",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward",
                "verbose_name_plural": "rewards",
                "ordering": ["-claimed_at"],
            },
        ),
        migrations.CreateModel(
            name="StampActivity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "stamp_count",
                    models.PositiveIntegerField(
                        help_text="Card stamp count after this activity",
                        verbose_name="stamp count",
                    ),
                ),
                ("customer_name", models.CharField(blank=True, max_length=200, verbose_name="customer name")),
                ("business_name", models.CharField(blank=True, max_length=200, verbose_name="business name")),
                ("note", models.CharField(blank=True, max_length=300, verbose_name="note")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.business",
                        verbose_name="business",
                    ),
                ),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="stampcard.customercard",
                        verbose_name="card",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.profile",
                        verbose_name="customer",
                    ),
                ),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="stampcard.loyaltyprogram",
                        verbose_name="program",
                    ),
                ),
            ],
            options={
                "verbose_name": "stamp activity",
                "verbose_name_plural": "stamp activities",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
