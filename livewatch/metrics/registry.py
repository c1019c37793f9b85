from prometheus_client import Counter, Gauge, Histogram

poll_duration_seconds = Histogram('poll_duration_seconds', 'Duration of a single live search poll')
polls_total = Counter('polls_total', 'Number of live search polls issued')
poll_errors_total = Counter('poll_errors_total', 'Number of poll errors')
last_poll_timestamp = Gauge('last_poll_timestamp', 'Unix timestamp of last successful poll')
live_items = Gauge('live_items', 'Number of live items returned by the last successful poll')

shutdown_signals_total = Counter('shutdown_signals_total', 'Termination signals received', ['signal'])

poller_state = Gauge('poller_state', 'State of the poll loop (0=idle,1=waiting,2=polling,3=shutting_down,4=terminated)')

POLLER_STATE_CODES = {
    'idle': 0,
    'waiting': 1,
    'polling': 2,
    'shutting_down': 3,
    'terminated': 4,
}
