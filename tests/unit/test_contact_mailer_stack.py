import aws_cdk as core
import aws_cdk.assertions as assertions
import pytest

from contact_mailer.contact_mailer_stack import ContactMailerStack


@pytest.fixture(scope="module")
def template():
    app = core.App()
    stack = ContactMailerStack(app, "contact-mailer")
    return assertions.Template.from_stack(stack)


def test_contact_tables_stream_new_documents(template):
    template.resource_count_is("AWS::DynamoDB::Table", 2)
    for table_name in ("contact_messages", "contacts"):
        template.has_resource_properties("AWS::DynamoDB::Table", {
            "TableName": table_name,
            "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
            "StreamSpecification": {"StreamViewType": "NEW_IMAGE"},
        })


def test_one_notifier_function_per_profile(template):
    template.resource_count_is("AWS::Lambda::Function", 2)
    for profile in ("contact_messages", "contacts"):
        template.has_resource_properties("AWS::Lambda::Function", {
            "Handler": "contact_notifier.lambda_handler",
            "Runtime": "python3.12",
            "Environment": {
                "Variables": assertions.Match.object_like({
                    "NOTIFIER_PROFILE": profile,
                    "MAIL_USER": {"Ref": "MailUser"},
                    "MAIL_PASS_PARAMETER": {"Ref": "MailPassParameter"},
                })
            },
        })


def test_no_password_is_baked_into_the_functions(template):
    functions = template.find_resources("AWS::Lambda::Function")
    for function in functions.values():
        assert "MAIL_PASS" not in function["Properties"]["Environment"]["Variables"]


def test_functions_subscribe_to_insert_events_one_at_a_time(template):
    template.resource_count_is("AWS::Lambda::EventSourceMapping", 2)
    template.has_resource_properties("AWS::Lambda::EventSourceMapping", {
        "BatchSize": 1,
        "StartingPosition": "LATEST",
        "MaximumRetryAttempts": 0,
        "FilterCriteria": assertions.Match.any_value(),
    })
    template.has_resource_properties("AWS::Lambda::EventSourceMapping", {
        "BatchSize": 1,
        "StartingPosition": "LATEST",
        "MaximumRetryAttempts": 2,
    })


def test_functions_can_read_the_mail_password_parameter(template):
    template.has_resource_properties("AWS::IAM::Policy", {
        "PolicyDocument": {
            "Statement": assertions.Match.array_with([
                assertions.Match.object_like({
                    "Action": "ssm:GetParameter",
                    "Effect": "Allow",
                })
            ])
        }
    })


def test_password_parameter_name_must_be_a_path(template):
    template.has_parameter("MailPassParameter", {
        "Type": "String",
        "Default": "/contact-mailer/mail-pass",
        "AllowedPattern": "^/.+",
    })
