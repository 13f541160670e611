from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("project_type", models.CharField(max_length=100)),
                ("description", models.TextField()),
                ("picture", models.CharField(blank=True, max_length=255)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("published", "Published"), ("completed", "Completed")], default="draft", max_length=32)),
                ("completion_stage", models.PositiveSmallIntegerField(default=1)),
                ("duration", models.CharField(blank=True, max_length=100)),
                ("total_team", models.PositiveIntegerField(default=0)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("budget", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("registration_deadline", models.DateTimeField(blank=True, null=True)),
                ("time_commitment", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("creator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="created_projects", to=settings.AUTH_USER_MODEL)),
                ("required_skills", models.ManyToManyField(blank=True, related_name="required_by_projects", to="catalog.skill")),
                ("benefits", models.ManyToManyField(blank=True, related_name="projects", to="catalog.benefit")),
                ("tags", models.ManyToManyField(blank=True, related_name="projects", to="catalog.tag")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "registration_deadline"], name="project_status_deadline_idx"),
                    models.Index(fields=["creator", "status"], name="project_creator_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectCondition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.TextField()),
                ("position", models.PositiveIntegerField(default=0)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="conditions", to="projects.project")),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProjectRole",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("slots_available", models.PositiveIntegerField(default=0)),
                ("description", models.TextField(blank=True)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="roles", to="projects.project")),
                ("skills", models.ManyToManyField(blank=True, related_name="project_roles", to="catalog.skill")),
            ],
            options={
                "ordering": ["id"],
                "unique_together": {("project", "name")},
            },
        ),
        migrations.CreateModel(
            name="ProjectMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("invited", "Invited"), ("accepted", "Accepted"), ("declined", "Declined")], default="invited", max_length=16)),
                ("source", models.CharField(choices=[("seeded", "Seeded by creator"), ("application", "Accepted application"), ("invitation", "Invitation")], default="seeded", max_length=16)),
                ("role_description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="members", to="projects.project")),
                ("role", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="members", to="projects.projectrole")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="project_memberships", to=settings.AUTH_USER_MODEL)),
                ("skills", models.ManyToManyField(blank=True, related_name="project_members", to="catalog.skill")),
            ],
            options={
                "ordering": ["created_at", "id"],
                "unique_together": {("project", "user")},
                "indexes": [
                    models.Index(fields=["user", "status"], name="member_user_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProjectTimeline",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("not-started", "Not Started"), ("in-progress", "In Progress"), ("done", "Done")], default="not-started", max_length=16)),
                ("position", models.PositiveIntegerField(default=0)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="timeline_entries", to="projects.project")),
                ("timeline", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="project_entries", to="catalog.timeline")),
            ],
            options={
                "ordering": ["position", "id"],
                "unique_together": {("project", "timeline")},
            },
        ),
        migrations.AddField(
            model_name="project",
            name="timeline",
            field=models.ManyToManyField(blank=True, related_name="projects", through="projects.ProjectTimeline", to="catalog.timeline"),
        ),
        migrations.CreateModel(
            name="ProjectApplication",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("accepted", "Accepted"), ("rejected", "Rejected"), ("withdrawn", "Withdrawn")], default="pending", max_length=16)),
                ("why_interested", models.TextField()),
                ("skills_experience", models.TextField()),
                ("contribution", models.TextField()),
                ("review_notes", models.TextField(blank=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("applied_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="applications", to="projects.project")),
                ("role", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="applications", to="projects.projectrole")),
                ("reviewed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_applications", to=settings.AUTH_USER_MODEL)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="project_applications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-applied_at"],
                "indexes": [
                    models.Index(fields=["project", "status"], name="application_project_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "withdrawn"), _negated=True),
                        fields=("project", "user"),
                        name="application_one_active_per_user",
                    ),
                ],
            },
        ),
    ]
