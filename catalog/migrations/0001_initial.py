from django.db import migrations, models
import django.db.models.functions.text


def _catalog_model(name):
    return migrations.CreateModel(
        name=name,
        fields=[
            ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
            ("name", models.CharField(max_length=100)),
            ("created_at", models.DateTimeField(auto_now_add=True)),
            ("updated_at", models.DateTimeField(auto_now=True)),
        ],
        options={
            "ordering": ["name"],
            "abstract": False,
        },
    )


def _name_constraint(model_name):
    return migrations.AddConstraint(
        model_name=model_name,
        constraint=models.UniqueConstraint(
            django.db.models.functions.text.Lower("name"),
            name=f"catalog_{model_name}_name_ci_uniq",
        ),
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        _catalog_model("Skill"),
        _catalog_model("Tag"),
        _catalog_model("Benefit"),
        _catalog_model("Timeline"),
        _name_constraint("skill"),
        _name_constraint("tag"),
        _name_constraint("benefit"),
        _name_constraint("timeline"),
    ]
