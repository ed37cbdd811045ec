"""Embedded ticket dataset served until a remote ticket source is wired in."""

SEED_TICKETS = [
    {
        "id": "ticket001",
        "customer_name": "Jamie",
        "issue_summary": "I can't log into my account after resetting my password. I've tried three times now and still get an error. Please help, this is really frustrating.",
        "tier": 1,
        "sentiment": "frustrated",
        "emotion": "urgent, annoyed",
    },
    {
        "id": "ticket002",
        "customer_name": "Alex",
        "issue_summary": "My recent order (ID: #XYZ123) hasn't arrived, and the tracking information hasn't updated in 3 days. Can you check on this for me?",
        "tier": 1,
        "sentiment": "concerned",
        "emotion": "anxious",
    },
    {
        "id": "ticket003",
        "customer_name": "Sam",
        "issue_summary": "I'm trying to integrate your API into my new project, but I'm getting a persistent authentication error (401). I've double-checked my API key. The documentation for endpoint X seems a bit unclear on the auth header format.",
        "tier": 2,
        "sentiment": "confused",
        "emotion": "seeking_clarification",
    },
    {
        "id": "ticket004",
        "customer_name": "Casey",
        "issue_summary": "Just wanted to say your new feature for custom dashboards is amazing! It's made my workflow so much smoother. Great job!",
        "tier": 0,
        "sentiment": "positive",
        "emotion": "happy, appreciative",
    },
    {
        "id": "ticket005",
        "customer_name": "Jamie",
        "issue_summary": "I'm still unable to log in after the password reset. I've followed all instructions carefully. Could there be a system-side issue?",
        "tier": 1,
        "sentiment": "calm",
        "emotion": "persistent, inquisitive",
    },
    {
        "id": "ticket006",
        "customer_name": "Jamie",
        "issue_summary": "Hi, I reset my password but login isn't working. I'm a bit lost on what to try next. Are there simple steps for this kind of error?",
        "tier": 1,
        "sentiment": "confused",
        "emotion": "seeking_guidance",
    },
    {
        "id": "ticket007",
        "customer_name": "Jamie",
        "issue_summary": "Password reset done, but login fails. Suspecting it might be a token validation or session propagation delay on your end. Can you check logs for user 'Jamie'?",
        "tier": 2,
        "sentiment": "analytical",
        "emotion": "technical, specific",
    },
    {
        "id": "ticket008",
        "customer_name": "Jamie",
        "issue_summary": "So sorry to bother, but I reset my password and can't log in. I'm worried I might have done something wrong during the process. Any help appreciated!",
        "tier": 1,
        "sentiment": "apologetic",
        "emotion": "hesitant, concerned_self",
    },
    {
        "id": "ticket009",
        "customer_name": "Jamie",
        "issue_summary": "I've tried resetting my password and also cleared my cache as often suggested, but I'm still locked out. Feeling a bit stuck but hopeful you can assist!",
        "tier": 1,
        "sentiment": "hopeful",
        "emotion": "stuck_but_optimistic",
    },
]
