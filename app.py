#!/usr/bin/env python3
import aws_cdk as cdk

from contact_mailer.contact_mailer_stack import ContactMailerStack


app = cdk.App()
ContactMailerStack(app, "ContactMailerStack")

app.synth()
