import uuid

from django.db import models


RISK_LEVELS = [
    ('low', 'Low'),
    ('medium', 'Medium'),
    ('high', 'High'),
]

RISK_ORDER = {'low': 0, 'medium': 1, 'high': 2}


class Contract(models.Model):
    FILE_TYPES = [
        ('pdf', 'PDF'),
        ('docx', 'DOCX'),
        ('txt', 'TXT'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    filename = models.CharField(max_length=255)
    original_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=10, choices=FILE_TYPES)
    file_size = models.PositiveIntegerField()
    file_path = models.CharField(max_length=1024)
    extracted_text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.original_name


class Analysis(models.Model):
    contract = models.OneToOneField(Contract, on_delete=models.CASCADE, related_name='analysis')
    overall_risk_level = models.CharField(max_length=10, choices=RISK_LEVELS)
    summary = models.TextField()
    raw_response = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'analyses'

    def __str__(self):
        return f"{self.contract.original_name} ({self.overall_risk_level})"


class Clause(models.Model):
    CLAUSE_TYPES = [
        ('liability', 'Liability Clause'),
        ('termination', 'Termination Clause'),
        ('confidentiality', 'Confidentiality Clause'),
        ('payment', 'Payment Terms Clause'),
    ]

    analysis = models.ForeignKey(Analysis, on_delete=models.CASCADE, related_name='clauses')
    type = models.CharField(max_length=20, choices=CLAUSE_TYPES)
    original_text = models.TextField()
    risk_level = models.CharField(max_length=10, choices=RISK_LEVELS)
    plain_language_explanation = models.TextField()
    risk_reasons = models.JSONField(default=list)
    is_override = models.BooleanField(default=False)
    override_justification = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.get_type_display()} - {self.risk_level}"
