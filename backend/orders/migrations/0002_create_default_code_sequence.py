from django.db import migrations


def create_default_sequence(apps, schema_editor):
    OrderCodeSequence = apps.get_model("orders", "OrderCodeSequence")
    OrderCodeSequence.objects.get_or_create(name="orders", defaults={"value": 0})


class Migration(migrations.Migration):

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_default_sequence, migrations.RunPython.noop),
    ]
